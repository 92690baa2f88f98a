"""
Host platform metadata store.

Checks for and creates mirror indexes through the indices API.
"""

from typing import Optional

from elasticsearch import Elasticsearch


class ESMetadataStore:
    """
    Index metadata store backed by the search platform's indices API.

    Implements the IMetadataStore interface.
    """

    def __init__(self, es_host: str, es_client: Optional[Elasticsearch] = None):
        """
        Initialize metadata store.

        Args:
            es_host: Search platform host URL
            es_client: Existing client to reuse instead of creating one
        """
        self.es_host = es_host
        self.es_client = es_client or Elasticsearch(hosts=[es_host])

    def exists(self, index_name: str) -> bool:
        return bool(self.es_client.indices.exists(index=index_name))

    def create(self, index_name: str, shards: int, replicas: int) -> bool:
        response = self.es_client.indices.create(
            index=index_name,
            settings={
                "index": {
                    "number_of_shards": shards,
                    "number_of_replicas": replicas,
                }
            },
        )
        return bool(response.get("acknowledged", False))

    def close(self) -> None:
        self.es_client.close()
