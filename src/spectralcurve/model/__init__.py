"""
The MODEL layer contains pure data structures and the numeric pipeline.
It has NO knowledge of the GUI (Qt).
It deals with curve evaluation, the spectrum table and chromaticity.
"""
