ERRORS = {
  "E_SIZE_MISMATCH": "Account payload size does not match BinArray layout",
  "E_DISCRIMINATOR": "Account discriminator is not a BinArray",
  "E_FETCH": "Fetching program accounts from RPC failed",
}

POLICIES = ("skip", "abort")
COMMITMENTS = ("processed", "confirmed", "finalized")
