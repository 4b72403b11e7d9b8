"""xcparse command line interface."""
