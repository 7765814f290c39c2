import sys

from utxo_spec.cli import main

sys.exit(main())
