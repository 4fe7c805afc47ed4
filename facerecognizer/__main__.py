"""Entry point for running the face recognizer as a module.

Usage:
    python -m facerecognizer recognize --image photo.jpg
"""

from .cli import run

if __name__ == "__main__":
    run()
