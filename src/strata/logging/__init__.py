"""
=======
Logging
=======

"""

from strata.logging.utilities import (
    configure_logging_to_file,
    configure_logging_to_terminal,
)
