from t3fire.pipeline import main

main()
