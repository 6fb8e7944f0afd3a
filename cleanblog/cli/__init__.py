"""cleanblog command line interface."""
