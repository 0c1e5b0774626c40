"""Command-line actions: store, sample generation and version."""