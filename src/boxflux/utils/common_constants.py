"""
The module is intended to give access to a set of unified keywords, units etc.

To access the quantities, invoke bf.KEY.

"""

""" Global keywords

Define unified keywords used throughout the software.
"""
# Section of boxflux.cfg holding the flux model configuration
FLUX_CONFIG_SECTION = "fluxes"

# Section of boxflux.cfg holding the logging configuration
LOGGING_CONFIG_SECTION = "logging"

# Permeability averaging on interior sub-control volume faces
DESIGNATED = "designated"
HARMONIC = "harmonic"

""" Default phase and component indices of the two-phase two-component model """
LIQUID_PHASE_INDEX = 0
GAS_PHASE_INDEX = 1

LIQUID_COMPONENT_INDEX = 0
GAS_COMPONENT_INDEX = 1

""" Units """
# SI Prefixes
NANO = 1e-9
MICRO = 1e-6
MILLI = 1e-3
CENTI = 1e-2
DECI = 1e-1
KILO = 1e3
MEGA = 1e6
GIGA = 1e9

# Time
SECOND = 1.0
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
YEAR = 365 * DAY

# Weight
KILOGRAM = 1.0
GRAM = 1e-3 * KILOGRAM

# Length
METER = 1.0
CENTIMETER = CENTI * METER
MILLIMETER = MILLI * METER
KILOMETER = KILO * METER

# Pressure related quantities
DARCY = 9.869233e-13
MILLIDARCY = MILLI * DARCY

PASCAL = 1.0
BAR = 100000 * PASCAL
ATMOSPHERIC_PRESSURE = 101325 * PASCAL


GRAVITY_ACCELERATION = 9.81 * METER / SECOND**2

# Temperature
CELSIUS = 1.0


def CELSIUS_to_KELVIN(celsius):
    return celsius + 273.15


def KELVIN_to_CELSIUS(kelvin):
    return kelvin - 273.15
