import sys

from asset_router.main import main

sys.exit(main())
