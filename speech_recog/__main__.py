from speech_recog.cli import main

raise SystemExit(main())
