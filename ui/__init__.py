"""
Qt user interface for the LED circuit simulation.
"""
