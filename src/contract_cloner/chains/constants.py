"""Static explorer lookup tables."""

ETHERSCAN_V2_URL = "https://api.etherscan.io/v2/api"
BASESCAN_URL = "https://api.basescan.org/api"

ETHERSCAN_KEY_VAR = "ETHERSCAN_API_KEY"
BASESCAN_KEY_VAR = "BASESCAN_API_KEY"

# chain_id -> (name, api base url, api key env var)
EXPLORERS = {
    1: ("Ethereum", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    8453: ("Base", BASESCAN_URL, BASESCAN_KEY_VAR),
    10: ("Optimism", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    56: ("BNB Smart Chain", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    100: ("Gnosis", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    137: ("Polygon PoS", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    5000: ("Mantle", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    42161: ("Arbitrum One", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    43114: ("Avalanche C-Chain", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    59144: ("Linea", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    81457: ("Blast", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    11155111: ("Sepolia", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
    84532: ("Base Sepolia", ETHERSCAN_V2_URL, ETHERSCAN_KEY_VAR),
}

CHAIN_ALIASES = {
    "eth": 1,
    "base": 8453,
}

API_KEY_SIGNUP_URLS = {
    ETHERSCAN_KEY_VAR: "https://etherscan.io/apis",
    BASESCAN_KEY_VAR: "https://basescan.org/",
}
