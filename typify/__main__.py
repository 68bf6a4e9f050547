"""
Same as the `typify` console script:

    py -m typify SIGNATURE [VALUE ...]
"""
from .cmdline import main

main()
