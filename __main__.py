''' ONWARD : a minimal concatenative language '''

import sys
from onward import main

sys.exit(main())
