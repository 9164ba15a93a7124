import sys

from hpmdata.generate_chip_data import main

sys.exit(main())
