"""
Module entry-point that makes the package runnable with

    python -m stringtie_gf
    python -m stringtie_gf.cli

The behaviour is identical to the *stringtie-gf-cli* console script.
"""

from stringtie_gf.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
