# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import sys

from traitxml.traitxmlc import main

sys.exit(main())
