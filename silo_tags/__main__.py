from silo_tags.core.harvesters.subgraph_harvester import main

if __name__ == "__main__":
    main()
