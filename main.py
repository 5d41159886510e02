import argparse
import random
import sys
from pathlib import Path

from sales_report import generator, settings
from sales_report.logger import setup_logger
from sales_report.pipelines.sales_report import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate sample sales data and build the sales reports."
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show every accepted sale line"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Write a synthetic catalog, roster and sale files"
    )
    generate.add_argument("--data-dir", type=Path, default=settings.DATA_DIR)
    generate.add_argument(
        "--products", type=int, default=settings.GENERATOR_PRODUCTS_COUNT
    )
    generate.add_argument(
        "--salespersons", type=int, default=settings.GENERATOR_SALESPERSONS_COUNT
    )
    generate.add_argument("--seed", type=int, default=settings.GENERATOR_SEED)

    products = subparsers.add_parser(
        "generate-products", help=f"Write only {settings.PRODUCTS_FILENAME}"
    )
    products.add_argument("--data-dir", type=Path, default=settings.DATA_DIR)
    products.add_argument(
        "--count", type=int, default=settings.GENERATOR_PRODUCTS_COUNT
    )
    products.add_argument("--seed", type=int, default=settings.GENERATOR_SEED)

    salespersons = subparsers.add_parser(
        "generate-salespersons", help=f"Write only {settings.SALESPERSONS_FILENAME}"
    )
    salespersons.add_argument("--data-dir", type=Path, default=settings.DATA_DIR)
    salespersons.add_argument(
        "--count", type=int, default=settings.GENERATOR_SALESPERSONS_COUNT
    )
    salespersons.add_argument("--seed", type=int, default=settings.GENERATOR_SEED)

    report = subparsers.add_parser(
        "report", help="Process the sale files and write both reports"
    )
    report.add_argument("--data-dir", type=Path, default=None)
    report.add_argument("--sales-dir", type=Path, default=None)
    report.add_argument("--output-dir", type=Path, default=None)
    report.add_argument(
        "--test-mode", action="store_true", help="Skip the webhook post"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(verbose=args.verbose)

    if args.command == "generate":
        logger.info("--- Generating Sample Data ---")
        generator.generate_dataset(
            data_dir=args.data_dir,
            products_count=args.products,
            salespersons_count=args.salespersons,
            seed=args.seed,
        )
        return 0

    if args.command == "generate-products":
        generator.create_products_file(
            args.count,
            random.Random(args.seed),
            args.data_dir / settings.PRODUCTS_FILENAME,
        )
        return 0

    if args.command == "generate-salespersons":
        generator.create_salespersons_file(
            args.count,
            random.Random(args.seed),
            args.data_dir / settings.SALESPERSONS_FILENAME,
        )
        return 0

    summary = run_pipeline(
        data_dir=args.data_dir,
        sales_dir=args.sales_dir,
        output_dir=args.output_dir,
        test_mode=args.test_mode,
    )
    if not summary.success:
        logger.error(
            "Check that the catalog and roster files exist in the data directory."
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
