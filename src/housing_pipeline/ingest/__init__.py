"""Ingestion of the source CSV into the raw MongoDB collection.

Reading is partitioned with Dask so large exports do not have to fit in a
single pandas frame before they are written to MongoDB.
"""
