"""
Application constants.

Centralized constants for the indexer.
"""

# ========================================================================
# WATCHED CONTRACT
# ========================================================================

DEFAULT_CONTRACT_ADDRESS = "0xac5c7493036de60e63eb81c5e9a440b42f47ebf5"
DEFAULT_START_BLOCK = 15_584_000

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = (
    "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
)

# Stored as Token.uri when tokenURI() output cannot be decoded
UNKNOWN_TOKEN_URI = "unknown"

# Minimal ERC-721 ABI: Transfer event + tokenURI metadata function
ERC721_ABI = [
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "from", "type": "address"},
            {"indexed": True, "name": "to", "type": "address"},
            {"indexed": True, "name": "tokenId", "type": "uint256"},
        ],
        "name": "Transfer",
        "type": "event",
    },
    {
        "inputs": [{"name": "tokenId", "type": "uint256"}],
        "name": "tokenURI",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

RPC_TIMEOUT = 30.0  # Per-call timeout in seconds
RPC_MAX_CONCURRENT = 10  # Maximum concurrent RPC calls
