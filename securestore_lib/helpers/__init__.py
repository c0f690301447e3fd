"""Pure helpers: key derivation and the chunk codec / storage encoder."""
