"""
Batch Reconciler.

Merges one batch of decoded transfers into the persisted Owner / Token /
Transfer state and commits it, together with the sync checkpoint, as a
single transaction.
"""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.owner import Owner
from nft_indexer.models.token import Token
from nft_indexer.models.transfer import Transfer
from nft_indexer.repositories.owner_repository import OwnerRepository
from nft_indexer.repositories.sync_state_repository import SyncStateRepository
from nft_indexer.repositories.token_repository import TokenRepository
from nft_indexer.repositories.transfer_repository import TransferRepository
from nft_indexer.services.base_service import BaseService, transaction
from nft_indexer.services.metadata_resolver import MetadataResolver
from nft_indexer.services.types import BatchContext, ReconcileResult, TransferData


class BatchReconciler(BaseService):
    """
    Apply a batch of transfers to the store.

    The owner and token maps built in reconcile() act as the identity map
    of the batch: every address and token id gets exactly one instance,
    whether it was loaded or created. They are discarded after the commit.
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: MetadataResolver,
        contract_address: str,
    ) -> None:
        """
        Initialize reconciler.

        Args:
            session: Database session; one reconcile() call = one transaction
            resolver: Metadata resolver for tokens seen for the first time
            contract_address: Watched contract (sync checkpoint key)
        """
        super().__init__(session)
        self.resolver = resolver
        self.contract_address = contract_address
        self.owner_repo = OwnerRepository(session)
        self.token_repo = TokenRepository(session)
        self.transfer_repo = TransferRepository(session)
        self.sync_repo = SyncStateRepository(session)

    @transaction
    async def reconcile(
        self,
        records: Sequence[TransferData],
        context: BatchContext,
    ) -> ReconcileResult:
        """
        Reconcile and commit one batch.

        Records must be in event order: when a token moves several times
        in the batch, the last transfer decides its owner.

        Args:
            records: Decoded transfers of the batch, in event order
            context: Block range of the batch

        Returns:
            Counters for the committed batch
        """
        token_ids, addresses = self.collect_ids(records)

        owners = await self.owner_repo.find_by_ids(addresses)
        tokens = await self.token_repo.find_by_ids(token_ids)
        loaded_owners = len(owners)
        loaded_tokens = len(tokens)

        uris = await self.resolver.resolve_many(self.new_tokens(records, tokens))

        transfers: list[Transfer] = []
        for record in records:
            from_ = self._get_or_create_owner(owners, record.from_address)
            to = self._get_or_create_owner(owners, record.to_address)

            key = str(record.token_id)
            token = tokens.get(key)
            if token is None:
                token = Token(id=key, uri=uris[record.token_id])
                tokens[key] = token
            token.owner = to

            transfers.append(
                Transfer(
                    id=record.id,
                    block_number=record.block_number,
                    timestamp=record.timestamp,
                    tx_hash=record.tx_hash,
                    from_=from_,
                    to=to,
                    token=token,
                )
            )

        await self.owner_repo.save_all(owners.values())
        await self.token_repo.save_all(tokens.values())
        await self.transfer_repo.insert_all(transfers)
        await self.sync_repo.advance(self.contract_address, context.to_block)

        result = ReconcileResult(
            to_block=context.to_block,
            transfers=len(transfers),
            owners=len(owners),
            owners_created=len(owners) - loaded_owners,
            tokens=len(tokens),
            tokens_created=len(tokens) - loaded_tokens,
        )
        self.logger.debug(
            f"[Reconciler] Blocks {context.from_block}-{context.to_block}: "
            f"{result.transfers} transfers, "
            f"{result.owners_created}/{result.owners} new owners, "
            f"{result.tokens_created}/{result.tokens} new tokens"
        )
        return result

    @staticmethod
    def collect_ids(records: Sequence[TransferData]) -> tuple[set[str], set[str]]:
        """Distinct token ids and distinct addresses referenced by a batch."""
        token_ids: set[str] = set()
        addresses: set[str] = set()
        for record in records:
            token_ids.add(str(record.token_id))
            addresses.add(record.from_address)
            addresses.add(record.to_address)
        return token_ids, addresses

    @staticmethod
    def new_tokens(
        records: Sequence[TransferData],
        known: dict[str, Token],
    ) -> dict[int, int]:
        """
        Tokens absent from the store, mapped to the height of their first transfer.

        That height is the point in time their metadata is read at.
        """
        pending: dict[int, int] = {}
        for record in records:
            if str(record.token_id) in known or record.token_id in pending:
                continue
            pending[record.token_id] = record.block_number
        return pending

    @staticmethod
    def _get_or_create_owner(owners: dict[str, Owner], address: str) -> Owner:
        owner = owners.get(address)
        if owner is None:
            owner = Owner(id=address)
            owners[address] = owner
        return owner
