"""Transport adapters: the router core itself never performs I/O."""
