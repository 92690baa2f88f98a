"""Search platform adapter for the gateway."""

from infino_gateway.adapters.elasticsearch.metadata_store import ESMetadataStore

__all__ = ["ESMetadataStore"]
