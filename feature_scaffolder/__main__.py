from feature_scaffolder.pipeline import main

main()
