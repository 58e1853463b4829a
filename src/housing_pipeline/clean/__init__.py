"""Cleaning passes for the property table.

Each pass fixes one data-quality defect and mutates the `PropertyTable` in
place. `pipeline.CleaningPipeline` runs them in their required order.
"""
