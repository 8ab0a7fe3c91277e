"""Allow running as: python -m kenlo_pricing"""

import sys

from kenlo_pricing.main import main

if __name__ == "__main__":
    sys.exit(main())
