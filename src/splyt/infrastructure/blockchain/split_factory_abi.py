"""
SplitFactory contract ABI (the subset this service calls).
"""

SPLIT_FACTORY_ABI = [
    {
        "type": "function",
        "name": "createSplit",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "creator", "type": "address"},
            {"name": "description", "type": "string"},
            {"name": "participants", "type": "address[]"},
            {"name": "amounts", "type": "uint256[]"},
            {"name": "expiryDays", "type": "uint256"},
        ],
        "outputs": [
            {"name": "splitId", "type": "uint256"},
            {"name": "splitAddress", "type": "address"},
        ],
    },
    {
        "type": "event",
        "name": "SplitCreated",
        "anonymous": False,
        "inputs": [
            {"name": "splitId", "type": "uint256", "indexed": True},
            {"name": "creator", "type": "address", "indexed": True},
            {"name": "splitAddress", "type": "address", "indexed": True},
            {"name": "totalAmount", "type": "uint256", "indexed": False},
            {"name": "participantCount", "type": "uint256", "indexed": False},
        ],
    },
]

# USDC uses 6 decimals on every supported chain
TOKEN_DECIMALS = 6
