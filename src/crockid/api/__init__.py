"""HTTP surface over the codec, checksum and ticket ID helpers."""
