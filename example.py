"""
Example usage of the polar-systematic package.
"""

import numpy as np
from polar_systematic import PolarCode


def main():
    # Parameters
    N = 16  # Code length (must be power of 2)
    K = 5   # Number of information bits
    design_snr = 0.0

    print("Polar Code Example")
    print("=" * 50)
    print()

    # Step 1: Code construction
    print("Step 1: Constructing polar codes...")
    default_code = PolarCode()
    code = PolarCode(N, K, design_snr)
    print("Default code:")
    print(default_code.info())
    print("Small code:")
    print(code.info())

    # Step 2: Systematic encoding
    print("Step 2: Encoding...")
    message = np.random.randint(0, 2, K)
    print(f"Message: {message}")

    codeword = code.encode(message)
    print(f"Codeword: {codeword}")
    print()

    # Step 3: Verification
    print("Step 3: Verification...")
    recovered = code.extract_information(codeword)
    if np.array_equal(recovered, message) and code.is_codeword(codeword):
        print("✓ Systematic encoding verified!")
    else:
        print("✗ Systematic encoding mismatch")


if __name__ == "__main__":
    main()
