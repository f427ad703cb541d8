"""Configuration app package.

Holds the single system-settings record that makes the rental domain
configurable: what an inventory item is called (equipment, car, unit,
...), which categories exist and which currency amounts are kept in.
"""
