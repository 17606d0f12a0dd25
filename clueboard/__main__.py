# Allows running with `python -m clueboard`
from .app import main

if __name__ == '__main__':
    main()
