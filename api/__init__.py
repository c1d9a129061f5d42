"""Orders service edge: command surface and HTTP side-car."""
