"""
Contract Caller.

Read-only contract calls evaluated at a historical block height.
"""

from collections.abc import Sequence
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger
from web3 import AsyncWeb3
from web3.contract import AsyncContract

from nft_indexer.config.constants import ERC721_ABI, RPC_TIMEOUT
from nft_indexer.services.rpc_wrapper import with_timeout
from nft_indexer.utils.exceptions import (
    METADATA_DECODING_ERRORS,
    ContractCallDecodingError,
)


class ContractCaller:
    """
    Point-in-time ``eth_call`` client.

    Contracts are created lazily and cached per address. Undecodable
    results surface as ContractCallDecodingError; every other failure
    (transport, revert, timeout) propagates unchanged. No retries.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        abi: list[dict[str, Any]] = ERC721_ABI,
        timeout: float = RPC_TIMEOUT,
    ) -> None:
        """
        Initialize contract caller.

        Args:
            w3: AsyncWeb3 instance (archive node for old heights)
            abi: ABI used for every contract
            timeout: Per-call timeout in seconds
        """
        self.w3 = w3
        self.abi = abi
        self.timeout = timeout
        self._contracts: dict[str, AsyncContract] = {}

    def contract(self, address: str) -> AsyncContract:
        """Get contract instance (lazy loaded)."""
        key = address.lower()
        if key not in self._contracts:
            self._contracts[key] = self.w3.eth.contract(
                address=to_checksum_address(address),
                abi=self.abi,
            )
            logger.debug(f"[ContractCaller] Contract created: {key}")
        return self._contracts[key]

    async def call(
        self,
        contract_address: str,
        function_name: str,
        args: Sequence[Any],
        block_height: int,
    ) -> Any:
        """
        Call a view function as of ``block_height``.

        Args:
            contract_address: Contract to call
            function_name: ABI function name, e.g. ``tokenURI``
            args: Positional call arguments
            block_height: Block whose state the call is evaluated against

        Returns:
            Decoded return value

        Raises:
            ContractCallDecodingError: If the returned data cannot be decoded
        """
        function = getattr(self.contract(contract_address).functions, function_name)
        try:
            return await with_timeout(
                function(*args).call(block_identifier=block_height),
                timeout=self.timeout,
                operation_name=f"{function_name}{tuple(args)} @ {block_height}",
            )
        except METADATA_DECODING_ERRORS as e:
            raise ContractCallDecodingError(
                function_name, block_height, str(e)
            ) from e
