"""Local persistence and cascade-consistency core for the Gym Progress log."""
