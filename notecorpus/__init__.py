"""Note Corpus Indexer.

Splits heading-delimited note files into segments, publishes them as an
immutable corpus snapshot and answers substring, tag and duplicate queries.
"""

__version__ = "0.1.0"
