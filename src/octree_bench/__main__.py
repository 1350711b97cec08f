import sys

from octree_bench.cli import main

sys.exit(main())
