# Bearer token issuing and verification
