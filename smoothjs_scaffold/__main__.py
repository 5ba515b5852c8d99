from smoothjs_scaffold.cli import console_main

console_main()
