from sonar_objc.cli import main

main()
