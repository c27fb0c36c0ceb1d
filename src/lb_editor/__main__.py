from lb_editor.app import main

raise SystemExit(main())
