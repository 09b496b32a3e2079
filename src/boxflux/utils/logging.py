""" Logging functionality for BoxFlux.

Logging is controlled by the configuration file boxflux.cfg, which should be
placed in the current working directory (where the python script is initiated).
All logging-related information is located in a section in the cfg-file with
heading logging; see sample file below.

By default, timing is switched off. It can be turned on by setting the keyword
'active' to True.

Flux reconstruction is called once per face and Newton iteration, thus the cost of
writing a log message (on the order 1e-5 seconds) quickly becomes relevant. To time
only parts of the code, functions are classified in the following (overlapping)
categories

    all: Used to time all decorated functions.
    fluxes: Reconstruction of face fluxes, gradients and diffusion coefficients.
    geometry: Computations related to the box-method element geometry.
    models: Configuration, volume variables and spatial parameters.

Example logging section of boxflux.cfg:

    [logging]
    # Activate logging. Without this, the rest of the section has no effect
    active: True
    # To time all functions in BoxFlux, there is no need for more information.

    # To only time specific sections, use e.g.
    sections: fluxes
    # multiple sections are separated by commas:
    sections: fluxes, geometry
    # Name of the log file, default BoxFluxTimings.log
    file: timings.log

"""
import functools
import inspect
import logging
import os
import time
from typing import Dict

import boxflux as bf

__all__ = ["time_logger"]


# Try to access configuration information, as activated by the import of BoxFlux
try:
    config: Dict = bf.config[bf.LOGGING_CONFIG_SECTION]  # type: ignore
    raw_sections = config.get("sections", "all")
    active_sections = [s.strip().lower() for s in raw_sections.split(",")]
    logger_is_active = config.get("active", "false").strip().lower() == "true"
    always_log = "all" in active_sections

except KeyError:
    config = {}
    active_sections = ["all"]
    logger_is_active = False
    always_log = True

t_logger = logging.getLogger("BoxFluxTimer")
t_logger.setLevel(logging.INFO)


def timing_file_handler(config) -> logging.FileHandler:
    """File handler for the timing log.

    Parameters:
        config: The logging section of boxflux.cfg. The key 'file' sets the name of the
            log file, default BoxFluxTimings.log in the working directory.

    """
    time_handler = logging.FileHandler(config.get("file", "BoxFluxTimings.log"))
    time_handler.setLevel(logging.INFO)
    time_formatter = logging.Formatter("%(message)s")
    time_handler.setFormatter(time_formatter)
    return time_handler


if logger_is_active and not t_logger.hasHandlers():
    t_logger.addHandler(timing_file_handler(config))

# Find where in the file path the directory 'boxflux' is located.
# We will use this below to strip away the common parts of file names.
separator = os.sep
path_length = __file__.split(separator).index("boxflux")


def time_logger(sections):
    """A decorator that measures elapsed time for a function.

    Parameters:
        sections: List of categories the decorated function belongs to. The call is
            timed if logging is active and any of the categories is active.

    """

    # The double nested function is needed to allow decorators with arguments.
    def inner_func(func):
        @functools.wraps(func)
        def log_time(*args, **kwargs):
            if not logger_is_active:
                # Shortcut if logging is not activated.
                return func(*args, **kwargs)
            elif always_log or any([s in active_sections for s in sections]):
                # Get the name of the file, but strip away the part above
                # '/src/boxflux'
                fn = separator.join(
                    inspect.getfile(func).split(separator)[path_length + 1 :]
                )

                name = f"{func.__qualname__} in file {fn}."

                t_logger.log(level=logging.INFO, msg=f"Calling {name}")

                start_time = time.perf_counter()
                value = func(*args, **kwargs)
                run_time = time.perf_counter() - start_time

                t_logger.log(
                    level=logging.INFO,
                    msg=f"Finished {name} Elapsed time: {run_time:.8f} s",
                )

                return value
            else:
                return func(*args, **kwargs)

        return log_time

    return inner_func
