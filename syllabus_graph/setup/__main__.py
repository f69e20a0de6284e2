import sys

from syllabus_graph.setup.cli import main

sys.exit(main())
