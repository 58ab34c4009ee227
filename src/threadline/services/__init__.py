"""Forum services: identity, votes, threads, authorization and lifecycle."""
