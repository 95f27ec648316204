"""HTTP front end for the blackjack engine."""
