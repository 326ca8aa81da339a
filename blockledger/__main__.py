from __future__ import annotations

from blockledger.main import main

raise SystemExit(main())
