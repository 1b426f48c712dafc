"""Starknet Python spec configuration constants.

Values consumed by hashing must stay bit-exact with what is observed on-chain.
"""

# Field
FIELD_PRIME = 2**251 + 17 * 2**192 + 1
FELT_BYTES = 32
MAX_FELT_HEX_DIGITS = 63

# Integer widths
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Address space
PATRICIA_KEY_UPPER_BOUND = 2**251
L2_ADDRESS_UPPER_BOUND = 2**251 - 256
BLOCK_HASH_TABLE_ADDRESS = 1  # reserved, never holds a contract
MAX_STORAGE_ITEM_SIZE = 256
ETH_ADDRESS_BYTES = 20

# Hashing
KECCAK_MASK = 2**250 - 1
MAX_ASCII_FELT_LENGTH = 31
PATRICIA_TREE_HEIGHT = 64
GENESIS_HASH = 0

# Transactions
DATA_AVAILABILITY_MODE_BITS = 32
CONSTRUCTOR_ENTRY_POINT_SELECTOR = (
    0x28FFE4FF0F226A9107253E17A904099AA4F63A02A5621DE0576E5AA71BC5194
)
QUERY_VERSION_BASE = 2**128
MAINNET_TRANSACTION_HASH_WITH_VERSION = 1470  # last block with legacy hashes

# Chain ids
SN_MAIN = "SN_MAIN"
SN_SEPOLIA = "SN_SEPOLIA"
SN_INTEGRATION_SEPOLIA = "SN_INTEGRATION_SEPOLIA"

# Domain tags (ASCII, encoded as felts where used)
CONTRACT_ADDRESS_PREFIX = "STARKNET_CONTRACT_ADDRESS"
STATE_DIFF_HASH_PREFIX = "STARKNET_STATE_DIFF0"
BLOCK_HASH_PREFIX = "STARKNET_BLOCK_HASH0"
DECLARE_TAG = "declare"
DEPLOY_TAG = "deploy"
DEPLOY_ACCOUNT_TAG = "deploy_account"
INVOKE_TAG = "invoke"
L1_HANDLER_TAG = "l1_handler"

# Resource names packed into V3 resource bounds (7 bytes, NUL padded)
L1_GAS_NAME = b"\0L1_GAS"
L2_GAS_NAME = b"\0L2_GAS"

# Block header packing
BLOB_DA_FLAG = 0x80
