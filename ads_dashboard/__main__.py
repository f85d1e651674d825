from ads_dashboard.main import main

raise SystemExit(main())
