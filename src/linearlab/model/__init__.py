"""
The MODEL layer contains pure data structures and the linear algebra.
It has NO knowledge of the GUI (Qt), the canvases or the insight service.
"""
