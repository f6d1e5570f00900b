# explorer_harness/queries/documents.py
# GraphQL documents understood by the explorer, one per query kind.

ADDRESS = """
query Address($bech32: String!) {
  address(bech32: $bech32) {
    id
    delegation {
      id
    }
  }
}
"""

ALL_STAKE_POOLS = """
query AllStakePools($first: Int!) {
  allStakePools(first: $first) {
    edges {
      node {
        id
      }
      cursor
    }
    totalCount
  }
}
"""

ALL_BLOCKS = """
query AllBlocks($last: Int!) {
  allBlocks(last: $last) {
    edges {
      node {
        id
        date {
          epoch {
            id
          }
          slot
        }
        chainLength
      }
      cursor
    }
    totalCount
  }
}
"""

BLOCKS_BY_CHAIN_LENGTH = """
query BlocksByChainLength($length: ChainLength!) {
  blocksByChainLength(length: $length) {
    id
    date {
      epoch {
        id
      }
      slot
    }
    chainLength
  }
}
"""

EPOCH = """
query Epoch($id: EpochNumber!, $blocks_limit: Int!) {
  epoch(id: $id) {
    id
    firstBlock {
      id
    }
    lastBlock {
      id
    }
    totalBlocks
    blocks(first: $blocks_limit) {
      edges {
        node {
          id
        }
        cursor
      }
      totalCount
    }
  }
}
"""

STAKE_POOL = """
query StakePool($id: PoolId!, $first: Int!) {
  stakePool(id: $id) {
    id
    registration {
      pool {
        id
      }
      startValidity
      managementThreshold
      owners
      operators
    }
    retirement {
      poolId
    }
    blocks(first: $first) {
      edges {
        node {
          id
        }
        cursor
      }
      totalCount
    }
  }
}
"""

SETTINGS = """
query Settings {
  settings {
    fees {
      constant
      coefficient
      certificate
    }
    epochStabilityDepth
  }
}
"""

ALL_VOTE_PLANS = """
query AllVotePlans($first: Int!) {
  allVotePlans(first: $first) {
    edges {
      node {
        id
        voteStart {
          epoch {
            id
          }
          slot
        }
        voteEnd {
          epoch {
            id
          }
          slot
        }
        committeeEnd {
          epoch {
            id
          }
          slot
        }
        payloadType
        proposals {
          proposalId
        }
      }
      cursor
    }
    totalCount
  }
}
"""

TRANSACTION_BY_ID = """
query TransactionById($id: String!) {
  transaction(id: $id) {
    id
    blocks {
      id
      date {
        epoch {
          id
        }
        slot
      }
      chainLength
    }
    inputs {
      amount
      address {
        id
      }
    }
    outputs {
      amount
      address {
        id
      }
    }
  }
}
"""

LAST_BLOCK = """
query LastBlock {
  tip {
    block {
      id
      date {
        epoch {
          id
        }
        slot
      }
      chainLength
    }
  }
}
"""
