import sys

from stackgraph.main import main

sys.exit(main())
