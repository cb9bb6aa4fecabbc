#!/usr/bin/env python
"""Verification script for the Lotto Exclusion Engine."""

import sys

def main():
    print("=" * 60)
    print("LOTTO EXCLUSION ENGINE VERIFICATION")
    print("=" * 60)

    errors = []

    # Test 1: Imports
    print("\n[1/5] Testing imports...")
    try:
        from lotto_exclusion import Config, DrawLoader, BacktestEngine, score_exclusions, replay, predict_next
        from lotto_exclusion.data.sample_data import generate_sample_draws, validate_sample_data
        print("  ✓ All imports successful")
    except ImportError as e:
        errors.append(f"Import failed: {e}")
        print(f"  ✗ {e}")
        return 1

    # Test 2: Sample data generation
    print("\n[2/5] Testing sample data generation...")
    try:
        draws = generate_sample_draws(n_draws=250, seed=42)
        assert len(draws) == 250, f"Expected 250 draws, got {len(draws)}"
        assert draws[-1].draw_no == 1249
        print(f"  ✓ Generated {len(draws)} draws")
    except Exception as e:
        errors.append(f"Sample data failed: {e}")
        print(f"  ✗ {e}")

    # Test 3: Sample data validation
    print("\n[3/5] Testing sample data validation...")
    try:
        validation = validate_sample_data(draws)
        assert validation["overall_healthy"], "Overall should be healthy"
        print(f"  ✓ Validation passed: uniformity p={validation['uniformity_p_value']:.3f}")
    except Exception as e:
        errors.append(f"Validation failed: {e}")
        print(f"  ✗ {e}")

    # Test 4: Scoring
    print("\n[4/5] Testing exclusion scoring...")
    try:
        exclusion = score_exclusions(draws)
        assert len(exclusion) == 10
        assert exclusion == sorted(set(exclusion))
        prediction = predict_next(draws)
        assert prediction.draw_no == 1250
        print(f"  ✓ Next draw {prediction.draw_no}: {list(prediction.exclusion_list)}")
    except Exception as e:
        errors.append(f"Scoring failed: {e}")
        print(f"  ✗ {e}")

    # Test 5: Full pipeline (mini)
    print("\n[5/5] Testing full pipeline...")
    try:
        engine = BacktestEngine(draws, Config(), verbose=False)
        results = engine.run()

        report = results["report"]
        assert report.total_draws == 46, f"Expected 46 evaluated draws, got {report.total_draws}"
        assert results["guard_report"]["status"] == "CLEAN"

        print(f"  ✓ Pipeline complete: {report.total_draws} draws, "
              f"avg success={report.avg_success_rate}%")
    except Exception as e:
        errors.append(f"Pipeline failed: {e}")
        print(f"  ✗ {e}")

    # Summary
    print("\n" + "=" * 60)
    if errors:
        print(f"FAILED: {len(errors)} error(s)")
        for err in errors:
            print(f"  - {err}")
        return 1
    else:
        print("ALL CHECKS PASSED ✓")
        return 0

if __name__ == "__main__":
    sys.exit(main())
