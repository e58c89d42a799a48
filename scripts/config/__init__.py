"""Paths, lookup tables and source layouts shared by the pipeline scripts."""
