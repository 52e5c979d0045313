"""JG TravelEx pricing and weather backend."""

__version__ = "0.1.0"
