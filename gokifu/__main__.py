import sys

from gokifu.tools.show_data import main

if __name__ == "__main__":
    sys.exit(main())
