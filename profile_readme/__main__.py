import sys

from profile_readme.main import cli

sys.exit(cli())
