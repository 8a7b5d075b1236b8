# snarkkit

Pure-Python building blocks for verifying (S)NARK proofs of PLONK-style proof
systems.

## Modules

- `snarkkit.arithmetic`: prime fields (`PrimeField`, `FieldElement`) with the
  BN254 scalar and base fields ready as `BN254_FR` and `BN254_FQ`;
  `root_of_unity`, evaluation domains (`Domain`, with `rotate_scalar`),
  `Rotation`, deferred `Fraction`s, in-place `batch_invert` and
  `batch_invert_and_mul` (zero entries are left as they are), limb encoding
  (`fe_to_limbs`, `fe_from_limbs`), `fe_to_fe`, `fe_from_big`, `fe_to_big`,
  `modulus`, the endless `powers` generator and `inner_product`.
- `snarkkit.curve`: short Weierstrass curves (`Curve`) and affine points
  (`Point`) with addition, negation, subtraction, doubling and scalar
  multiplication. `BN254_G1` is predefined.
- `snarkkit.poly`: univariate `Polynomial` in coefficient form, with
  `evaluate`, coefficient-wise `+` and `-`, adding a constant, scaling and
  `Polynomial.random`.
- `snarkkit.msm`: deferred multi-scalar multiplication (`Msm`: `constant`,
  `base`, `+`, `-`, scaling, `split`, `try_into_constant`, `evaluate`) and the
  bucket-method `multi_scalar_multiplication`.
- `snarkkit.transcript`: the abstract `Transcript`, `TranscriptRead` and
  `TranscriptWrite`, and `EvmTranscript`, which hashes with Keccak-256 and
  reads or writes big-endian 32-byte words. Failures are raised as
  `TranscriptError`, which carries a `kind` and a `message`.
- `snarkkit.config`: `Config`, the immutable options for compiling a verifying
  key into a protocol (`Config.kzg()`, `Config.ipa()`, `set_zk`,
  `set_query_instance`, `with_num_proof`, `with_num_instance`,
  `with_accumulator_indices`).
- `snarkkit.layout`: `PolynomialLayout` numbers the fixed, instance, witness,
  permutation, lookup, random and quotient polynomials of a constraint system
  described by a `ConstraintSystemShape`, and lists its `Query`s in proof
  order (`evaluations`) and opening order (`queries`).
- `snarkkit.parallel`: `parallelize_iter` and `parallelize`, which run a
  function over items, or over chunks of a list, on a thread pool.

## Installation

```
pip install snarkkit
```

## Examples

```python
import io

from snarkkit.arithmetic import BN254_FR, Domain, batch_invert, fe_to_limbs, root_of_unity
from snarkkit.config import Config
from snarkkit.curve import BN254_G1
from snarkkit.msm import multi_scalar_multiplication
from snarkkit.transcript import EvmTranscript

fr = BN254_FR
values = [fr(2), fr(3), fr(0), fr(5)]
batch_invert(values)                  # the zero stays zero
limbs = fe_to_limbs(fr(-1), fr, 4, 68)

domain = Domain(4, root_of_unity(fr, 4))
shifted = domain.rotate_scalar(fr(1), -1)

g = BN254_G1.generator
assert multi_scalar_multiplication([fr(3), fr(5)], [g, g.double()]) == g * 13

writer = EvmTranscript(io.BytesIO())
writer.write_scalar(fr(42))
challenge = writer.squeeze_challenge()

reader = EvmTranscript(io.BytesIO(writer.finalize().getvalue()))
assert reader.read_scalar() == fr(42)
assert reader.squeeze_challenge() == challenge

config = Config.kzg().with_num_proof(2).with_num_instance([1])
```

## What it does not do

- It has no complete proof verifier: it supplies the arithmetic, transcript,
  configuration and polynomial layout such a verifier is built from, but
  nothing that checks a whole proof, and no pairing.
- `PolynomialLayout` works from a `ConstraintSystemShape` you build yourself;
  it does not read verifying keys or parameter files, and it builds no
  constraint expressions or quotient polynomial.
- Only zero-knowledge layouts are supported; `PolynomialLayout` raises
  `ValueError` when `zk` is false.
- The only concrete transcript is `EvmTranscript`.

## Running the tests

```
pip install -e ".[test]"
pytest
```