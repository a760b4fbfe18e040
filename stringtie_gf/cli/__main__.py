"""Module wrapper so running ``python -m stringtie_gf.cli`` matches the console script."""

from stringtie_gf.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
