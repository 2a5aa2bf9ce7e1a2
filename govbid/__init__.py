"""
GovBid compliance document analysis service.

Durable queue that analyzes uploaded checklist documents with a generative
model and projects structured compliance findings onto file records.
"""

__version__ = "0.1.0"
