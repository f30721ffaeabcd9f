from phosphor_snake.play import main

raise SystemExit(main())
