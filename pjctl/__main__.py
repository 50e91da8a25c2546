# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from .cli import run

if __name__ == "__main__":
    run()
