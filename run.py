"""
Entry Point Script (Bootstrap)
==============================
Starting point of the application for development.

It lives outside the 'src' package and puts 'src' on 'sys.path' so that
imports like 'from spectralcurve.model...' resolve without installing.

Usage:
    $ python run.py [--spectrum PATH] [--log-level DEBUG]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from spectralcurve.main import main

if __name__ == "__main__":
    sys.exit(main())
