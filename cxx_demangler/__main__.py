import sys

from cxx_demangler.cli import main

sys.exit(main())
