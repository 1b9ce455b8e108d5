"""Vector store provider implementations.

Pinecone is the sole vector store implementation.  Only the upsert path is
used: each embedding batch becomes one ``POST /vectors/upsert`` call against
the index host in PINECONE_BASE_URL.

To target another vector database (Qdrant, Weaviate), create a new class
implementing IVectorStoreProvider and wire it in bootstrap.py.
"""

from atlas_export.providers.vector_store.pinecone_provider import PineconeVectorStore

__all__ = ["PineconeVectorStore"]
