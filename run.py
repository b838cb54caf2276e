import logging
import sys
import traceback

from config import CRASH_LOG_FILE, LOG_FORMAT, LOG_LEVEL

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
log = logging.getLogger("cannon_calc")


def excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    log.critical("unhandled exception\n%s", msg)
    try:
        with open(CRASH_LOG_FILE, "a", encoding="utf-8") as f:
            f.write(msg + "\n")
    except OSError:
        log.exception("could not write %s", CRASH_LOG_FILE)
    sys.exit(1)


sys.excepthook = excepthook

from ui import main  # noqa: E402

if __name__ == "__main__":
    main()
