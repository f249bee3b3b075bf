"""txledger — client-side tracker for submitted blockchain transactions."""
