import logging


def setup_default_logging(level: int | str = "INFO"):
    '''
    Configure the root logger once. Does nothing if the application already
    installed handlers. Only the entry point should call this.
    '''
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
