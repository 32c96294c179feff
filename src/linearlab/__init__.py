"""Linear Matrix Lab: an interactive visualizer for 2D/3D linear transformations."""
