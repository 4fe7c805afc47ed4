#!/usr/bin/env python3
"""Command line interface for the face recognizer.

Usage:
    python -m facerecognizer enroll --name "Alice" --id 42 --image alice.jpg
    python -m facerecognizer enroll --name "Alice" --id 42 --vector alice.embedding
    python -m facerecognizer recognize --image photo.jpg
    python -m facerecognizer recognize --vector probe.embedding --debug
    python -m facerecognizer list
    python -m facerecognizer check --vector probe.embedding

Embedding files hold the vector as comma-separated decimal values, the same
format used for enrolled faces in the store directory.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from . import __version__
from .constants import Config
from .detection import HaarFaceLocator
from .errors import CorruptRecord, FaceRecognizerError, InvalidInput
from .liveness import BaseLivenessChecker, DnnLivenessChecker
from .presentation import format_debug_report, format_decision, format_enrollment, format_recognition
from .recognition import (
    EMBEDDING_BACKENDS,
    BaseEmbeddingBackend,
    DirectoryEmbeddingRepository,
    EmbeddingStore,
    MatchEngine,
    parse_embedding,
)
from .service import FaceRecognitionService, RecognitionStatus
from .session import RegistrationSession

logger = logging.getLogger(__name__)


def setup_logging(config: Config, verbose: bool = False) -> None:
    """Configure the root logger from the logging config section."""
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level, logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format, force=True)


def create_embedding_backend(config: Config) -> BaseEmbeddingBackend:
    """Create the embedding backend named in the embedding config section."""
    backend = config.embedding.backend
    if backend not in EMBEDDING_BACKENDS:
        logger.warning(f"Unknown embedding backend '{backend}', using facenet")
        backend = "facenet"
    return EMBEDDING_BACKENDS[backend](config.embedding, config.matching.embedding_dim)


def create_liveness_checker(config: Config) -> Optional[BaseLivenessChecker]:
    """Create the anti-spoof checker, or None when its model is not installed."""
    if not Path(config.liveness.model_path).exists():
        logger.warning(
            f"Anti-spoof model not found at {config.liveness.model_path}, liveness check disabled"
        )
        return None
    return DnnLivenessChecker(config.liveness)


def build_service(config: Config, store_dir: Optional[str] = None) -> FaceRecognitionService:
    """Create the service with its store loaded from disk."""
    repository = DirectoryEmbeddingRepository(
        store_dir or config.storage.directory,
        suffix=config.storage.suffix,
    )
    store = EmbeddingStore(repository, embedding_dim=config.matching.embedding_dim)
    store.load_all()

    return FaceRecognitionService(
        store=store,
        engine=MatchEngine(config.matching),
        embedder=create_embedding_backend(config),
        locator=HaarFaceLocator(config.localization),
        liveness=create_liveness_checker(config),
    )


def read_vector(path: str, dim: int) -> np.ndarray:
    """Read a comma-separated embedding file."""
    vector_path = Path(path)
    text = vector_path.read_text(encoding="utf-8")
    return np.asarray(parse_embedding(vector_path.stem, text, dim), dtype=np.float32)


def read_image(path: str) -> Optional[np.ndarray]:
    image = cv2.imread(path)
    if image is None:
        logger.error(f"Could not load image: {path}")
    return image


def cmd_enroll(args, config: Config) -> int:
    """Enroll a face from an image or an embedding file."""
    service = build_service(config, args.store)
    session = RegistrationSession(args.name, args.id)

    if args.vector:
        result = service.enroll_embedding(session, read_vector(args.vector, config.matching.embedding_dim))
    else:
        image = read_image(args.image)
        if image is None:
            return 1
        result = service.enroll(session, image)

    print(format_enrollment(result))
    return 0 if result.enrolled else 1


def cmd_recognize(args, config: Config) -> int:
    """Recognize a face from an image or an embedding file."""
    service = build_service(config, args.store)

    if args.vector:
        decision = service.recognize_embedding(read_vector(args.vector, config.matching.embedding_dim))
        print(format_decision(decision, config.matching))
    else:
        image = read_image(args.image)
        if image is None:
            return 1
        result = service.recognize(image)
        print(format_recognition(result, config.matching))
        if result.status != RecognitionStatus.DECIDED:
            return 1
        decision = result.decision

    if args.debug:
        print()
        print(format_debug_report(decision, service.store.identities(), config.matching))
    return 0


def cmd_list(args, config: Config) -> int:
    """List enrolled identities."""
    service = build_service(config, args.store)
    identities = service.store.identities()

    print(f"Loaded {len(identities)} registered faces")
    for identity in identities:
        print(f"  - {identity}")
    return 0


def cmd_check(args, config: Config) -> int:
    """Validate an embedding file."""
    try:
        vector = read_vector(args.vector, config.matching.embedding_dim)
    except CorruptRecord as e:
        print(f"Invalid: {e.reason}")
        return 1

    print(f"OK: {vector.shape[0]} values, norm {float(np.linalg.norm(vector)):.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="face-recognizer",
        description="Face enrollment and recognition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  face-recognizer enroll --name "Alice" --id 42 --image alice.jpg
  face-recognizer recognize --image photo.jpg --debug
  face-recognizer list
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", default=None, help="Path to configuration file")
    parser.add_argument("--store", "-s", default=None, help="Directory with enrolled embeddings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Enroll command
    enroll_parser = subparsers.add_parser("enroll", help="Enroll a face")
    enroll_parser.add_argument("--name", "-n", required=True, help="User name")
    enroll_parser.add_argument("--id", required=True, help="User id (identity key)")
    enroll_source = enroll_parser.add_mutually_exclusive_group(required=True)
    enroll_source.add_argument("--image", "-i", help="Image containing the face")
    enroll_source.add_argument("--vector", help="Precomputed embedding file")

    # Recognize command
    recognize_parser = subparsers.add_parser("recognize", help="Recognize a face")
    recognize_source = recognize_parser.add_mutually_exclusive_group(required=True)
    recognize_source.add_argument("--image", "-i", help="Image containing the face")
    recognize_source.add_argument("--vector", help="Precomputed probe embedding file")
    recognize_parser.add_argument("--debug", action="store_true", help="Print the debug report")

    # List command
    subparsers.add_parser("list", help="List enrolled identities")

    # Check command
    check_parser = subparsers.add_parser("check", help="Validate an embedding file")
    check_parser.add_argument("--vector", required=True, help="Embedding file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line. Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = Config.from_file(Path(args.config) if args.config else None)
    setup_logging(config, args.verbose)

    # Route to command handler
    commands = {
        "enroll": cmd_enroll,
        "recognize": cmd_recognize,
        "list": cmd_list,
        "check": cmd_check,
    }

    try:
        return commands[args.command](args, config)
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1
    except (InvalidInput, CorruptRecord) as e:
        logger.error(str(e))
        return 1
    except FaceRecognizerError as e:
        logger.error(f"Face recognizer error: {e}")
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
