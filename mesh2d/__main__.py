import argparse
import logging
import sys

from PySide6 import QtWidgets

from .errors import MeshError
from .utility import setup_default_logging
from .windows import MainWindow

logger = logging.getLogger(__name__)


def open_initial(window: MainWindow, path) -> bool:
    '''Load the file given on the command line, start empty if it can't be read.'''
    try:
        window.main_widget.open_file(path)
    except (MeshError, OSError, ValueError) as e:
        logger.error("could not open %s: %s", path, e)
        return False
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(prog="mesh2d", description="Interactive 2D mesh editor")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("obj", nargs="?", help="OBJ file to open")
    args = parser.parse_args(argv)

    setup_default_logging(args.log_level)

    app = QtWidgets.QApplication(sys.argv[:1])
    w = MainWindow()
    if args.obj:
        open_initial(w, args.obj)
    w.resize(900, 700)
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
