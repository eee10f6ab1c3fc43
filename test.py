import unittest
from contracting.client import ContractingClient

from deploy import deploy

TOKEN = 10 ** 18 # one whole token in base units


class TestTaxableToken(unittest.TestCase):
    def setUp(self):
        self.client = ContractingClient()
        self.client.flush() # Ensures a clean state

        # Define user accounts
        self.owner = 'sys' # The one who submits the contract, becomes owner
        self.liquidity_pool = 'con_pair_tax_currency'
        self.reward_pool = 'reward_pool' # excluded from tax
        self.development_pool = 'development_pool' # excluded from tax
        self.alice = 'alice'
        self.bob = 'bob'

        self.init_supply = 1000000
        self.total_supply = self.init_supply * TOKEN

        self.token = deploy(
            self.client,
            initial_supply=self.init_supply,
            reward_pool=self.reward_pool,
            development_pool=self.development_pool,
            signer=self.owner
        )

    def tearDown(self):
        self.client.flush()

    # --- Deployment ---
    def test_deployment_sets_owner_and_pools(self):
        print("\n--- Test: Deployment Sets Owner And Pools ---")
        self.assertEqual(self.token.get_owner(), self.owner)
        self.assertEqual(self.token.get_reward_pool(), self.reward_pool)
        self.assertEqual(self.token.get_development_pool(), self.development_pool)
        self.assertIsNone(self.token.get_liquidity_pool())
        self.assertEqual(self.token.get_tax_percentage(), 4)

    def test_deployment_credits_whole_supply_to_owner(self):
        print("\n--- Test: Deployment Credits Whole Supply To Owner ---")
        self.assertEqual(self.token.get_total_supply(), self.total_supply)
        self.assertEqual(self.token.balance_of(address=self.owner), self.total_supply)
        self.assertEqual(self.token.balance_of(address=self.alice), 0)

    # --- Transfer ---
    def test_normal_transfers_take_no_tax(self):
        print("\n--- Test: Normal Transfers Take No Tax ---")
        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)
        self.assertEqual(self.token.balance_of(address=self.alice), value)

        self.token.transfer(amount=value, to=self.bob, signer=self.alice)

        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.bob), value)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.owner), self.total_supply - value)

    def test_buy_and_sell_take_four_percent_tax(self):
        print("\n--- Test: Buy/Sell Take 4% Tax ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)

        # Sell
        self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.alice)
        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), 96 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 2 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 2 * TOKEN)

        # Buy
        self.token.transfer(amount=50 * TOKEN, to=self.bob, signer=self.liquidity_pool)
        self.assertEqual(self.token.balance_of(address=self.bob), 48 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), 46 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 3 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 3 * TOKEN)

    def test_users_can_buy_or_sell_two_percent_of_supply_at_most(self):
        print("\n--- Test: Max Transaction Is 2% Of Supply ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = self.total_supply * 3 // 100
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)

        with self.assertRaisesRegex(AssertionError, "exceeds the max transaction amount"):
            self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.alice)
        self.assertEqual(self.token.balance_of(address=self.alice), value)

        value = self.total_supply * 2 // 100
        self.assertTrue(self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.alice))

    def test_owner_and_tax_pools_are_excluded_from_tax(self):
        print("\n--- Test: Owner And Tax Pools Excluded From Tax ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = self.total_supply * 2 // 100
        self.token.transfer(amount=value, to=self.reward_pool, signer=self.owner)
        self.token.transfer(amount=value, to=self.development_pool, signer=self.owner)

        self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.reward_pool)
        self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.development_pool)

        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), value * 2)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.owner), self.total_supply - value * 2)

    # --- TransferFrom ---
    def test_transfer_from_normal_transfers_take_no_tax(self):
        print("\n--- Test: TransferFrom Normal Transfers Take No Tax ---")
        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)

        self.token.approve(amount=value, to=self.bob, signer=self.alice)
        self.token.transfer_from(amount=value, to=self.bob, main_account=self.alice, signer=self.bob)

        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.bob), value)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 0)
        self.assertEqual(self.token.allowance(owner=self.alice, spender=self.bob), 0)

    def test_transfer_from_buy_and_sell_take_four_percent_tax(self):
        print("\n--- Test: TransferFrom Buy/Sell Take 4% Tax ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)
        self.token.approve(amount=value, to=self.bob, signer=self.alice)

        self.token.transfer_from(amount=value, to=self.liquidity_pool, main_account=self.alice, signer=self.bob)

        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), 96 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 2 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 2 * TOKEN)

    def test_transfer_from_respects_max_transaction(self):
        print("\n--- Test: TransferFrom Respects Max Transaction ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = self.total_supply * 3 // 100
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)
        self.token.approve(amount=value, to=self.bob, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "exceeds the max transaction amount"):
            self.token.transfer_from(amount=value, to=self.liquidity_pool, main_account=self.alice, signer=self.bob)
        # The failed call must not have spent any allowance
        self.assertEqual(self.token.allowance(owner=self.alice, spender=self.bob), value)

        value = self.total_supply * 2 // 100
        self.assertTrue(self.token.transfer_from(
            amount=value, to=self.liquidity_pool, main_account=self.alice, signer=self.bob
        ))

    def test_transfer_from_tax_pools_are_excluded_from_tax(self):
        print("\n--- Test: TransferFrom Tax Pools Excluded From Tax ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        value = self.total_supply * 2 // 100
        self.token.transfer(amount=value, to=self.reward_pool, signer=self.owner)
        self.token.transfer(amount=value, to=self.development_pool, signer=self.owner)

        self.token.approve(amount=value, to=self.alice, signer=self.reward_pool)
        self.token.transfer_from(amount=value, to=self.liquidity_pool, main_account=self.reward_pool, signer=self.alice)
        self.token.approve(amount=value, to=self.bob, signer=self.development_pool)
        self.token.transfer_from(amount=value, to=self.liquidity_pool, main_account=self.development_pool, signer=self.bob)

        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), value * 2)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 0)
        self.assertEqual(self.token.balance_of(address=self.owner), self.total_supply - value * 2)

    def test_transfer_from_beyond_allowance_fails(self):
        print("\n--- Test: TransferFrom Beyond Allowance Fails ---")
        self.token.transfer(amount=100 * TOKEN, to=self.alice, signer=self.owner)
        self.token.approve(amount=10 * TOKEN, to=self.bob, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Transfer amount exceeds allowance"):
            self.token.transfer_from(amount=10 * TOKEN + 1, to=self.bob, main_account=self.alice, signer=self.bob)

        self.assertEqual(self.token.balance_of(address=self.alice), 100 * TOKEN)
        self.assertEqual(self.token.allowance(owner=self.alice, spender=self.bob), 10 * TOKEN)

    # --- Tax ---
    def test_update_tax_percentage(self):
        print("\n--- Test: Update Tax Percentage ---")
        self.token.set_liquidity_pool(address=self.liquidity_pool, signer=self.owner)
        self.token.set_tax_percentage(percentage=8, signer=self.owner)
        self.assertEqual(self.token.get_tax_percentage(), 8)

        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)
        self.token.transfer(amount=value, to=self.liquidity_pool, signer=self.alice)

        self.assertEqual(self.token.balance_of(address=self.liquidity_pool), 92 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 4 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 4 * TOKEN)

    def test_update_tax_addresses(self):
        print("\n--- Test: Update Tax Addresses ---")
        self.token.set_development_pool(address=self.development_pool, signer=self.owner)
        self.token.set_reward_pool(address=self.reward_pool, signer=self.owner)

        # Bob acts as the liquidity pool first
        self.token.set_liquidity_pool(address=self.bob, signer=self.owner)
        value = 100 * TOKEN
        self.token.transfer(amount=value, to=self.alice, signer=self.owner)
        self.token.transfer(amount=value, to=self.bob, signer=self.alice)

        self.assertEqual(self.token.balance_of(address=self.bob), 96 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.alice), 0)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 2 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 2 * TOKEN)

        # Then Alice becomes the liquidity pool
        self.token.set_liquidity_pool(address=self.alice, signer=self.owner)
        self.token.transfer(amount=value, to=self.bob, signer=self.owner)
        self.token.transfer(amount=value, to=self.alice, signer=self.bob)

        self.assertEqual(self.token.balance_of(address=self.alice), 96 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.bob), 96 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.reward_pool), 4 * TOKEN)
        self.assertEqual(self.token.balance_of(address=self.development_pool), 4 * TOKEN)

    # --- Ownership ---
    def test_only_owner_can_transfer_ownership(self):
        print("\n--- Test: Only Owner Can Transfer Ownership ---")
        with self.assertRaisesRegex(AssertionError, "Only owner can call this method"):
            self.token.transfer_ownership(new_owner=self.bob, signer=self.alice)

        self.token.transfer_ownership(new_owner=self.bob, signer=self.owner)
        self.assertEqual(self.token.get_owner(), self.bob)

        # The previous owner lost every gated right
        with self.assertRaisesRegex(AssertionError, "Only owner can call this method"):
            self.token.set_tax_percentage(percentage=10, signer=self.owner)
        self.token.set_tax_percentage(percentage=10, signer=self.bob)
        self.assertEqual(self.token.get_tax_percentage(), 10)


if __name__ == '__main__':
    unittest.main()
