from vcs_gh.assistant.main import main

raise SystemExit(main())
