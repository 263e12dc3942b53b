#!/usr/bin/env python
"""
Learn a DFA with L* and write it as a Graphviz DOT file.

Usage:
    python run_lstar.py
    python run_lstar.py --regex "(ab)*" --alphabet a b --output ab.dot
    python run_lstar.py --tomita 5 --oracle w_method --counterexample-mode prefixes
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import CounterexampleMode, LearnerConfig
from core.lstar import LStarAlgorithm, LearningBudgetExceeded, ProtocolViolation
from grammars.tomita import TOMITA_ALPHABET, get_tomita_grammar
from teacher.oracle_config import OracleType, get_default_configs
from teacher.teacher import PredicateTeacher, RegexTeacher


# Odd number of a's
DEFAULT_REGEX = "^(b*ab*){1}(b*ab*b*ab*){0,}$"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Learn a DFA from a regex or Tomita grammar with Angluin's L*",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Learn the default language (odd number of a's) over {a, b}
  python run_lstar.py

  # Learn a custom regex
  python run_lstar.py --regex "a*" --alphabet a b

  # Learn Tomita grammar 3 with a W-method equivalence oracle
  python run_lstar.py --tomita 3 --oracle w_method --counterexample-mode prefixes
        """
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument('--regex', type=str, default=None,
                        help=f'Target regular expression (default: {DEFAULT_REGEX})')
    target.add_argument('--tomita', type=int, choices=range(1, 8), default=None,
                        help='Learn a Tomita grammar over {0, 1} instead of a regex')

    parser.add_argument('--alphabet', nargs='+', default=['a', 'b'],
                        help='Alphabet symbols for --regex (default: a b)')
    parser.add_argument('--oracle', choices=[t.value for t in OracleType], default='bfs',
                        help='Equivalence oracle (default: bfs)')
    parser.add_argument('--counterexample-mode', choices=[m.value for m in CounterexampleMode],
                        default=CounterexampleMode.VERBATIM.value,
                        help='How counterexamples enter the table (default: verbatim)')
    parser.add_argument('--max-iterations', type=int, default=100,
                        help='Maximum equivalence queries (default: 100)')
    parser.add_argument('--max-queries', type=int, default=None,
                        help='Maximum membership queries (default: unbounded)')
    parser.add_argument('--time-limit', type=float, default=None,
                        help='Time limit in seconds (default: unbounded)')
    parser.add_argument('--output', type=str, default='hypothesis.dot',
                        help='DOT output file (default: hypothesis.dot)')
    parser.add_argument('--separator', type=str, default='',
                        help='Separator between symbols in state names (default: none)')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the final result')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command line interface."""
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    oracle_config = get_default_configs()[args.oracle]
    oracle_config.verbose = verbose

    try:
        if args.tomita is not None:
            grammar, description, _ = get_tomita_grammar(args.tomita)
            teacher = PredicateTeacher(grammar, TOMITA_ALPHABET, oracle_config)
            target = f"Tomita {args.tomita}: {description}"
        else:
            pattern = args.regex if args.regex is not None else DEFAULT_REGEX
            teacher = RegexTeacher(pattern, args.alphabet, oracle_config)
            target = f"regex {pattern}"
        config = LearnerConfig(
            max_iterations=args.max_iterations,
            max_membership_queries=args.max_queries,
            time_limit=args.time_limit,
            counterexample_mode=args.counterexample_mode,
            verbose=verbose
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    print(f"Learning {target} (oracle: {args.oracle})")

    start_time = time.time()
    learner = LStarAlgorithm(teacher, config=config)
    try:
        hypothesis = learner.run()
    except LearningBudgetExceeded as e:
        print(f"\nLearning stopped: {e}")
        return 1
    except ProtocolViolation as e:
        print(f"\nTeacher protocol violation: {e}")
        return 1

    if verbose:
        learner.print_summary()

    output = Path(args.output)
    output.write_text(hypothesis.to_dot(args.separator))
    print(f"Learned DFA with {len(hypothesis)} states in {time.time() - start_time:.2f}s")
    print(f"Hypothesis written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
