"""
Services.

Ingestion and reconciliation layer.
"""

from nft_indexer.services.batch_reconciler import BatchReconciler
from nft_indexer.services.chain_source import Web3LogSource
from nft_indexer.services.contract_caller import ContractCaller
from nft_indexer.services.event_decoder import EventDecoder
from nft_indexer.services.metadata_resolver import (
    LookupStatus,
    MetadataResolver,
    UriLookup,
)
from nft_indexer.services.pipeline import IndexerPipeline, get_resume_height

__all__ = [
    "BatchReconciler",
    "ContractCaller",
    "EventDecoder",
    "IndexerPipeline",
    "LookupStatus",
    "MetadataResolver",
    "UriLookup",
    "Web3LogSource",
    "get_resume_height",
]
