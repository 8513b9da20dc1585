"""ctpl — CLI silnika szablonów umów (komendy w ctpl.commands)."""
