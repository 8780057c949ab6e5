"""Example usage of the schema analyzer - Single page analysis."""

from schema_intel import AnalysisConfig, analyze_schemas


def main():
    """Run example schema analysis."""

    entities = [
        {
            "@context": "https://schema.org",
            "@type": "SoftwareApplication",
            "@id": "https://example.com/#app",
            "name": "Example App",
            "applicationCategory": "BusinessApplication",
            "offers": {"@type": "Offer", "price": "0", "priceCurrency": "USD"},
        },
        {
            "@context": "https://schema.org",
            "@type": "Organization",
            "name": "Example Corp",
            "url": "https://example.com",
        },
    ]

    url = "https://example.com"
    print(f"Analyzing {url}...")

    result = analyze_schemas(entities, url, AnalysisConfig(business_type="saas"))

    print(f"\nOpportunity Score: {result.opportunity_score}/100")
    for name, value in result.score_breakdown.to_dict().items():
        print(f"  {name}: {value}/100")

    print("\nRich Results:")
    for verdict in result.eligible_rich_results:
        status = "eligible" if verdict.eligible else "not eligible"
        print(f"  • {verdict.name}: {status} ({verdict.confidence.value}) - {verdict.reason}")

    print("\nRecommendations:")
    for rec in result.recommendations:
        print(f"  • [{rec.priority.value}] {rec.title}: {rec.description}")


if __name__ == "__main__":
    main()
