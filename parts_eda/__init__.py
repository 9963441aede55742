"""Pricing and availability EDA over the electronic parts database."""

__version__ = '0.1.0'
