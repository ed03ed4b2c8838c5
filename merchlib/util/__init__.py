"""General-purpose helpers: text and signing, hashing, AES, Curve25519, decimals, UUIDs, JSON, paging, time and IP handling."""