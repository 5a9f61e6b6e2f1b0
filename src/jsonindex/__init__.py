"""jsonindex

Index writer that streams documents to a JSON Lines file on local disk or S3.

Public API surface:
- jsonindex.writers.JsonIndexWriter : the streaming writer
- jsonindex.document : IndexDocument / IndexField
- jsonindex.storage : storage backends and path resolution
- jsonindex.index_writers.IndexWriters : drive writers from a YAML config
"""
__all__ = ["__version__"]
__version__ = "0.1.0"
