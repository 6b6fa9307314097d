"""
Run with: python -m spectralcurve
"""
import sys

from spectralcurve.main import main

if __name__ == "__main__":
    sys.exit(main())
