import sys

from twentyone.blackjack.blackjack import main

sys.exit(main())
