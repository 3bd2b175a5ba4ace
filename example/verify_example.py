from dappauth import DappAuth, SignerKind, VerificationError, Web3ContractCaller

challenge = "Sign in to example.org, nonce=8f1c"  # Replace with the issued challenge
signature = "0xxxx"  # Replace with the wallet's personal_sign output
address = "0xxxx"  # Replace with the claimed address

# Reads DAPPAUTH_RPC_URL from the environment or a .env file
auth = DappAuth(Web3ContractCaller.from_env())


async def main():
    try:
        eoa = await auth.is_authorized_signer(challenge, signature, address)
        wallet = await auth.is_authorized_signer(
            challenge, signature, address, signer_kind=SignerKind.CONTRACT
        )
    except VerificationError as exc:
        # Inconclusive, not a denial
        return f"could not verify: {exc}"
    return {"eoa": eoa, "contract_wallet": wallet}


if __name__ == "__main__":
    import asyncio
    print("Result:", asyncio.run(main()))
