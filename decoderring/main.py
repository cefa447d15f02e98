# decoderring/main.py
import sys
import os

# Ensure the package root is discoverable when run as a plain script
if __package__ is None and not hasattr(sys, "frozen"):
    path = os.path.realpath(os.path.abspath(__file__))
    sys.path.insert(0, os.path.dirname(os.path.dirname(path)))

from decoderring.cli import app

def run():
    """Console entry point; logging is configured by the app callback."""
    app(prog_name="decoderring")

if __name__ == "__main__":
    run()
