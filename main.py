import sys

from clip_to_wsl.main import main

if __name__ == "__main__":
    sys.exit(main())
