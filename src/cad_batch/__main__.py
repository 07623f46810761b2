import sys

from cad_batch.presentation.cli import main

sys.exit(main())
