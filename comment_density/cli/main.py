import logging
import sys

from comment_density.core.errors import CommentDensityError
from .arguments import build_parser
from .runner import build_engine

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        try:
            engine = build_engine(
                args.path,
                args.config,
                workers=args.workers,
                exclude_dirs=args.exclude_dirs,
                as_json=args.json,
            )
            result = engine.run()
        except CommentDensityError as exc:
            print(f"An error occurred: {exc}", file=sys.stderr)
            return 1

        output = engine.export(result)

        if args.output:
            try:
                with open(args.output, "w", encoding="utf-8") as f:
                    f.write(output + "\n")
            except OSError as exc:
                print(f"An error occurred: cannot write {args.output}: {exc}", file=sys.stderr)
                return 1
        else:
            print(output)

    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
