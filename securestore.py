# Command line entry point for the securestore item store
import sys

from securestore_lib.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
