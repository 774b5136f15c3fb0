import sys

from image_filters.cli.main import main

sys.exit(main())
