"""
NTU Name Service (NNS) bidder core.

Client-side building blocks for blind name auctions:
- Bid secrets and contract-compatible commitments
- A durable local ledger of sealed bids
- Auction phase resolution from contract timestamps
- Recipient classification (address vs. name)
"""
