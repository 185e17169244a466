import sys

from csv_llm_fill.cli import main

sys.exit(main())
