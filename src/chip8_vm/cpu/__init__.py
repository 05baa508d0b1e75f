"""CPU core: registers, stack, decoder and executor."""
