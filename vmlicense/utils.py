import logging


def get_confirmation(prompt="Continue? (y/n): "):
    """
    Prompts the user for confirmation (yes or no).

    Args:
        prompt (str): The confirmation prompt to display (default: "Continue? (y/n): ")

    Returns:
        bool: True if user confirms (yes), False otherwise.
    """
    while True:
        answer = input(prompt).lower()
        if answer in ["y", "yes"]:
            return True
        elif answer in ["n", "no"]:
            return False
        else:
            print("Invalid input. Please enter 'y' or 'n'.")


class CustomFormatter(logging.Formatter):

    black = "\x1b[30;1m"
    bold_green = "\x1b[32;1m"
    bold_yellow = "\x1b[33;1m"
    bright_red = "\x1b[91;1m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    FORMATS = {
        logging.DEBUG: black + format + reset,
        logging.INFO: bold_green + format + reset,
        logging.WARNING: bold_yellow + format + reset,
        logging.ERROR: bright_red + format + reset,
        logging.CRITICAL: bold_red + format + reset
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def start_logging(debug_level=False, log_filename=None):
    """Sets up console logging for the vmlicense package and, if a file name is given, a debug log file."""

    logger = logging.getLogger("vmlicense")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(CustomFormatter())
    console_handler.setLevel(logging.DEBUG if debug_level else logging.INFO)
    logger.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(filename=log_filename)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG)
    # the SDK is very chatty at INFO
    logging.getLogger("azure").setLevel(logging.WARNING)
    return logger
