"""Front-ends: console REPL and its plain-text view."""
