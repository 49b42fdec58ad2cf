"""Command line front-end for the signature benchmark harness."""
