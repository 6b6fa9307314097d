"""
The CONTROLLER layer connects Qt widgets to the pure model.
"""
