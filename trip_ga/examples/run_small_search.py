from trip_ga.data import random_euclidean_table
from trip_ga.evolutionary import EvolutionConfig, EvolutionarySearch


def main():
    destinations, table = random_euclidean_table(25, seed=7)
    cfg = EvolutionConfig(
        generations=200,
        population_size=100,
        survivor_divisor=10,
        random_seed=7,
        report_interval=0,
    )

    def progress(report):
        if report.generation % 20 == 0:
            print(f"gen {report.generation}: best={report.best_distance} global={report.global_best_distance}")

    search = EvolutionarySearch(cfg, destinations, table, on_generation=progress)
    best = search.run()
    print(best.describe())


if __name__ == "__main__":
    main()
