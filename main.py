"""Print an outfit recommendation for a demo request against the local wardrobe."""

import argparse
import json

from stylist_app.app import WardrobeStylistApp
from tools.seed_wardrobe import seed_wardrobe


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one outfit recommendation locally")
    parser.add_argument("--seed", action="store_true", help="Seed sample items into an empty wardrobe first.")
    parser.add_argument("--occasion", default="Weekend brunch")
    parser.add_argument("--style", default="relaxed")
    parser.add_argument("--formality", default="casual")
    parser.add_argument("--comfort", type=int, default=8)
    parser.add_argument("--budget", default="any")
    args = parser.parse_args()

    app = WardrobeStylistApp()
    if args.seed:
        seed_wardrobe(app.wardrobe_store)
    result = app.outfit_stylist.recommend_outfits(
        {
            "occasion": args.occasion,
            "style": args.style,
            "formality": args.formality,
            "comfort": args.comfort,
            "budget": args.budget,
        }
    )
    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
