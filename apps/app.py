import os, sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
from usbthermo.cli import main

if __name__ == "__main__":
    sys.exit(main())
