"""Cardano ledger data models"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LedgerModel(BaseModel):
    """Base for ledger models; upstream numbers headed for string fields stay exact"""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class Asset(LedgerModel):
    """Native asset entry (or lovelace) as returned by Blockfrost"""

    unit: str = Field(..., description="'lovelace' or policy id + hex asset name")
    quantity: str = Field(..., description="Quantity as a decimal string")


class Block(LedgerModel):
    """Cardano block"""

    hash: str = Field(..., description="Block hash (64 hex chars)")
    height: Optional[int] = Field(None, description="Block number")
    slot: Optional[int] = Field(None, description="Absolute slot")
    epoch: Optional[int] = Field(None, description="Epoch number")
    epoch_slot: Optional[int] = Field(None, description="Slot within the epoch")
    time: int = Field(..., description="Block time (Unix seconds)")
    size: int = Field(default=0, description="Block size in bytes")
    tx_count: int = Field(default=0, description="Number of transactions")
    output: Optional[str] = Field(None, description="Total output in lovelace")
    fees: Optional[str] = Field(None, description="Total fees in lovelace")
    slot_leader: Optional[str] = Field(None, description="Pool or genesis key that produced the block")
    block_vrf: Optional[str] = Field(None, description="VRF key of the block")
    previous_block: Optional[str] = Field(None, description="Hash of the previous block")
    next_block: Optional[str] = Field(None, description="Hash of the next block")
    confirmations: int = Field(default=0, description="Number of confirmations")


class TransactionInput(LedgerModel):
    """Transaction input (a consumed UTXO)"""

    address: str = Field(..., description="Address that owned the UTXO")
    amount: str = Field(..., description="Lovelace amount")
    tx_hash: str = Field(..., description="Transaction that created the UTXO")
    output_index: int = Field(..., description="Output index in that transaction")
    collateral: bool = Field(default=False, description="Whether the input is collateral")


class TransactionOutput(LedgerModel):
    """Transaction output"""

    address: str = Field(..., description="Recipient address")
    amount: str = Field(..., description="Lovelace amount")
    output_index: Optional[int] = Field(None, description="Output index")
    assets: List[Asset] = Field(default_factory=list, description="Native assets, lovelace excluded")


class Transaction(LedgerModel):
    """Cardano transaction with resolved UTXOs"""

    hash: str = Field(..., description="Transaction hash")
    block_hash: str = Field(..., description="Block hash")
    block_height: Optional[int] = Field(None, description="Block number")
    block_time: Optional[int] = Field(None, description="Block time (Unix seconds)")
    slot: Optional[int] = Field(None, description="Slot")
    index: Optional[int] = Field(None, description="Position within the block")
    fees: str = Field(default="0", description="Fee in lovelace")
    deposit: str = Field(default="0", description="Deposit in lovelace")
    size: int = Field(default=0, description="Size in bytes")
    invalid_before: Optional[str] = Field(None, description="Validity interval start slot")
    invalid_hereafter: Optional[str] = Field(None, description="Validity interval end slot")
    input_count: int = Field(default=0, description="Number of inputs")
    output_count: int = Field(default=0, description="Number of outputs")
    input_amount: str = Field(default="0", description="Sum of lovelace over inputs")
    output_amount: str = Field(default="0", description="Sum of lovelace over outputs")
    inputs: List[TransactionInput] = Field(default_factory=list, description="Inputs")
    outputs: List[TransactionOutput] = Field(default_factory=list, description="Outputs")


class TransactionSummary(LedgerModel):
    """Row of a block's transaction list"""

    hash: str = Field(..., description="Transaction hash")
    block: str = Field(..., description="Block hash")
    block_time: Optional[int] = Field(None, description="Block time (Unix seconds)")
    inputs: int = Field(default=0, description="Number of inputs")
    outputs: int = Field(default=0, description="Number of outputs")
    input_amount: str = Field(default="0", description="Sum of lovelace over inputs")
    output_amount: str = Field(default="0", description="Sum of lovelace over outputs")
    fees: str = Field(default="0", description="Fee in lovelace")


class AddressUtxo(LedgerModel):
    """Unspent output held by an address"""

    tx_hash: str = Field(..., description="Transaction ID")
    output_index: int = Field(..., description="Output index")
    amount: str = Field(..., description="Lovelace amount")
    assets: List[Asset] = Field(default_factory=list, description="Native assets")
    block: Optional[str] = Field(None, description="Block hash")


class AddressTransaction(LedgerModel):
    """Entry in an address's transaction history"""

    tx_hash: str = Field(..., description="Transaction ID")
    tx_index: Optional[int] = Field(None, description="Position within the block")
    block_height: Optional[int] = Field(None, description="Block number")
    block_time: Optional[int] = Field(None, description="Block time (Unix seconds)")


class Address(LedgerModel):
    """Cardano address information"""

    address: str = Field(..., description="Bech32 or Byron address")
    balance: str = Field(default="0", description="Lovelace balance")
    assets: List[Asset] = Field(default_factory=list, description="Native asset holdings")
    stake_address: Optional[str] = Field(None, description="Associated stake address")
    type: Optional[str] = Field(None, description="Address era (byron or shelley)")
    script: bool = Field(default=False, description="Whether the address is a script address")
    utxos: List[AddressUtxo] = Field(default_factory=list, description="Unspent outputs")
    transactions: List[AddressTransaction] = Field(
        default_factory=list, description="Recent transactions, newest first"
    )


class Reward(LedgerModel):
    """Staking reward for one epoch"""

    epoch: int
    amount: str
    pool_id: Optional[str] = None
    type: Optional[str] = None


class StakeAccount(LedgerModel):
    """Stake address (reward account)"""

    stake_address: str
    active: bool = False
    active_epoch: Optional[int] = None
    controlled_amount: str = "0"
    rewards_sum: str = "0"
    withdrawals_sum: str = "0"
    withdrawable_amount: str = "0"
    pool_id: Optional[str] = None
    rewards: List[Reward] = Field(default_factory=list, description="First rewards returned upstream")


class PoolMetadata(LedgerModel):
    """Off-chain pool metadata"""

    url: Optional[str] = None
    hash: Optional[str] = None
    ticker: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None


class Pool(LedgerModel):
    """Stake pool"""

    pool_id: str
    hex: Optional[str] = None
    vrf_key: Optional[str] = None
    blocks_minted: int = 0
    live_stake: Optional[str] = None
    active_stake: Optional[str] = None
    declared_pledge: Optional[str] = None
    live_pledge: Optional[str] = None
    margin_cost: Optional[float] = None
    fixed_cost: Optional[str] = None
    reward_account: Optional[str] = None
    owners: List[str] = Field(default_factory=list)
    metadata: Optional[PoolMetadata] = None


class Epoch(LedgerModel):
    """Epoch summary"""

    epoch: int
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    first_block_time: Optional[int] = None
    last_block_time: Optional[int] = None
    block_count: int = 0
    tx_count: int = 0
    output: Optional[str] = None
    fees: Optional[str] = None
    active_stake: Optional[str] = None
