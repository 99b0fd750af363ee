from .logs import setup_default_logging
from .theme import themed, themed_gray, is_dark_mode
